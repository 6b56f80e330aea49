"""Test suite for the formstate engine.

This package contains tests for:
- Type predicates
- Validators (required field, email format)
- Rule variants and rule coercion
- Construction-input validation
- Event system (emission, serialization)
- FormEngine operations and end-to-end form scenarios
"""

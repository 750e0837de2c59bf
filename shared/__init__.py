"""
Shared utilities for the token service.

This package aggregates the cross-cutting building blocks used by
service_tokens:

- config: Token settings via pydantic-settings
- logging: Structured logging with correlation context
- errors: Canonical token error types and responses
- test_helpers: Factories for claim sets and tokens used by the test suites

Do not import from service_tokens into shared/.
"""

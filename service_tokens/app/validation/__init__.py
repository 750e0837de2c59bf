"""
Token validation package.

Verifies signatures and runs the ordered claim checks: issuer, expiration,
audience, not-before, issued-at, subject, token id and caller-named claims.
The first failing check ends validation; no claims are returned for a token
that did not pass every enabled check.
"""

"""
Token assembly and parsing.

Typical responsibilities include:

- Building the header and signing input for new tokens.
- Splitting received tokens into their segments while keeping the exact
  signing input that was signed.
- Stamping registered claims (iat, exp, nbf, iss, aud, sub, jti) when
  issuing tokens from configuration.
"""

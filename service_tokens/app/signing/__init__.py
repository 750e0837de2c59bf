"""
HMAC signing. Only symmetric algorithms are provided.
"""

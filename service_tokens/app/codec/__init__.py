"""
Wire-level codecs: unpadded base64url and canonical claim JSON.
"""

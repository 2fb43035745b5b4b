"""
Sigil - Key material and request signing for AntChain REST access.
"""

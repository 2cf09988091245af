"""
The `crypt` package provides the password utilities behind the login flow.

Contents
--------
- encrypt_decrypt
    Utility module exposing the `EncryptionDec` class:
        * `hash_password` — hashes plaintext passwords using bcrypt
        * `check_passwords` — verifies a plaintext password against a stored hash
"""

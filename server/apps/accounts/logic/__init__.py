"""Business logic layer for accounts app.

- Credential registration and login
- Google ID token sign-in and account linking
- Bearer token issuance and verification
"""

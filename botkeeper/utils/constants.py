"""
botkeeper/utils/constants.py

Purpose: Centralized static content

- All user-facing response messages

(Prevents hardcoding across the codebase)
"""

# ============================================================
# VALIDATION
# ============================================================

USERNAME_TOO_SHORT = "Username must be at least 3 characters long!"
INVALID_EMAIL = "Invalid email format!"
PASSWORD_TOO_SHORT = "Password must be at least 5 characters long!"
PASSWORD_MISMATCH = "Passwords do not match!"

# ============================================================
# ACCOUNTS
# ============================================================

USER_EXISTS = "User already exists!"
USER_NOT_FOUND = "User not found!"
INVALID_CREDENTIALS = "Invalid email or password!"

REGISTRATION_SUCCESS = "Registration successful!"
LOGIN_SUCCESS = "Login successful!"
USER_UPDATED = "User updated successfully!"
USER_DELETED = "User deleted successfully!"

# ============================================================
# STATE & BOTS
# ============================================================

STATE_UPDATED = "State updated successfully!"
BOT_ADDED = "Bot added successfully!"
BOT_EXISTS = "Bot already exists!"
BOT_MOVED = "Bot moved to completed successfully!"
ACTIVE_BOT_NOT_FOUND = "Active bot not found!"

MALFORMED_STATE = "Trading bot state is malformed!"

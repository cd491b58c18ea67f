"""Authentication: admin users, tokens and sessions."""

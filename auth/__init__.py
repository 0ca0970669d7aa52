"""
auth — User authentication module.

Provides:
  • Signed token creation & verification (7-day access, 1-hour reset)
  • Password hashing (bcrypt, off the event loop)
  • ``UserStore`` — in-memory email-keyed user table
  • Register / Login / Profile / Password-reset API routes
  • ``get_current_claims`` FastAPI dependency
"""

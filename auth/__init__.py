"""
auth — User authentication module.

Provides:
  • Credential validation (e-mail syntax, password policy)
  • Password hashing (bcrypt)
  • Signed, time-bound token creation & verification
  • Signup / Login API routes
  • The bearer-token gate and its FastAPI dependencies
"""

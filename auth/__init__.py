"""
auth — User account module.

Provides:
  • Signed session tokens with short / extended lifetimes
  • Password hashing (bcrypt)
  • createUser / login / deleteUser / updateUser / submitOnboardingAnswers / getUser routes
  • ``get_current_identity`` FastAPI dependency
"""

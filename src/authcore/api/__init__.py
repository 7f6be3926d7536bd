"""
authcore.api

HTTP adapter over the auth core (FastAPI).
"""

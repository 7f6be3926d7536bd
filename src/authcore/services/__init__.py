"""
authcore.services

Service layer (session-chain orchestration over credentials, signer and store).
"""

"""
authcore.db.repositories

Repository implementations over the async session factory.
"""

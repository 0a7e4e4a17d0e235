"""
Declarative bases for the two kinds of database file.

IdentityBase tables live in the shared users.db; StoreBase tables are created
in every per-user store.
"""
from sqlalchemy.orm import declarative_base

IdentityBase = declarative_base()
StoreBase = declarative_base()

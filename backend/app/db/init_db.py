"""
Database initialization script.

Creates the data directory and the shared identity database. Per-user stores
are created on demand; pass user ids to provision them up front.
"""
import sys
from app.core.config import get_settings
from app.db.session import create_identity_engine
from app.db.store import StoreProvisioner

if __name__ == "__main__":
    settings = get_settings()
    print(f"Initializing database in {settings.DATABASE_PATH}...")
    create_identity_engine(settings.DATABASE_PATH).dispose()
    provisioner = StoreProvisioner(settings.DATABASE_PATH)
    for user_id in sys.argv[1:]:
        provisioner.open_store(user_id)
        print(f"Provisioned store for user {user_id}")
    provisioner.dispose()
    print("Database initialized successfully!")

#!/usr/bin/env python3
"""
Database Initialization Script
Run once after cloning to create the tables and an Admin account.
"""
import argparse
import getpass
import sys


def main():
    """Initialize database and optionally create an Admin account"""
    parser = argparse.ArgumentParser(description="Create tables and an optional Admin account")
    parser.add_argument("--admin-email", help="Email of the Admin account to create")
    args = parser.parse_args()

    print("=" * 60)
    print("Evaluation Portal - Database Initialization")
    print("=" * 60)

    from evalhub.config import settings
    from evalhub.database import init_db, SessionLocal
    from evalhub.services.users import ensure_admin

    print("\n🔨 Creating database tables...")
    init_db()
    print(f"✅ Database schema created ({settings.database_url})")

    email = args.admin_email or settings.seed_admin_email
    if not email:
        print("⏭️  No admin email given, skipping admin account")
        return

    password = settings.seed_admin_password or getpass.getpass(f"Password for {email}: ")
    if len(password) < 6:
        print("❌ Password must be at least 6 characters")
        sys.exit(1)

    db = SessionLocal()
    try:
        admin = ensure_admin(db, email, password)
        if admin:
            print(f"✅ Admin account created: {admin.email}")
        else:
            print(f"⏭️  Account {email} already exists")
    except Exception as e:
        print(f"❌ Error during initialization: {e}")
        db.rollback()
        sys.exit(1)
    finally:
        db.close()

    print("\n" + "=" * 60)
    print("🎉 Database initialization completed!")
    print("=" * 60)
    print("\n📝 Next steps:")
    print("   1. Configure .env file with your settings")
    print("   2. Run: uvicorn evalhub.main:app --reload --host 0.0.0.0 --port 8000")
    print("=" * 60)


if __name__ == "__main__":
    main()

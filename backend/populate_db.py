import os
import sys
from decimal import Decimal

# Add 'backend' folder to Python path
sys.path.append(os.path.abspath(os.path.dirname(__file__)))

from config import settings
from database import SessionLocal, init_db
from models.users import User, ADMIN_ROLE_ID
from models.catalog import Category, Service
from utils.hashing import get_password_hash

# Sample catalog: category name -> (name, description, price, duration)
SAMPLE_CATALOG = {
    "Cleaning": [
        ("Apartment cleaning", "Standard cleaning of rooms, kitchen and bathroom.", "120.00", "3 hours"),
        ("Window washing", "Inside and outside of up to ten windows.", "80.00", "2 hours"),
        ("Carpet shampooing", "Deep cleaning of carpets and rugs.", "150.00", "4 hours"),
    ],
    "Repairs": [
        ("Plumbing fix", "Leaking taps, blocked drains and small pipe repairs.", "100.00", "1 hour"),
        ("Furniture assembly", "Assembly of flat-pack furniture.", "60.00", "2 hours"),
        ("Electrical check", "Socket, switch and lighting inspection.", "90.00", "1 hour"),
    ],
    "Garden": [
        ("Lawn mowing", "Mowing and edging of a lawn up to 300 m2.", "70.00", "2 hours"),
        ("Hedge trimming", "Shaping and trimming of hedges.", "85.00", "3 hours"),
    ],
}


def ensure_admin(session):
    """Creates the admin account from ADMIN_EMAIL / ADMIN_PASSWORD if missing."""
    email = settings.ADMIN_EMAIL.strip().lower()
    admin = session.query(User).filter(User.email == email).first()
    if admin:
        print(f"Admin {email} already exists.")
        return admin

    admin = User(
        email=email,
        password_hash=get_password_hash(settings.ADMIN_PASSWORD),
        full_name="Administrator",
        role_id=ADMIN_ROLE_ID,
    )
    session.add(admin)
    session.flush()
    print(f"Created admin {email}.")
    return admin


def load_catalog(session):
    added = 0
    for category_name, services in SAMPLE_CATALOG.items():
        category = session.query(Category).filter(Category.name == category_name).first()
        if not category:
            category = Category(name=category_name)
            session.add(category)
            session.flush()

        for name, description, price, duration in services:
            exists = session.query(Service.id).filter(
                Service.name == name, Service.category_id == category.id
            ).first()
            if exists:
                continue
            session.add(Service(
                name=name,
                description=description,
                price=Decimal(price),
                duration=duration,
                image_url=f"https://picsum.photos/seed/{name.replace(' ', '-').lower()}/300/300",
                category_id=category.id,
            ))
            added += 1
    print(f"Inserted {added} services.")


def populate_database():
    """Main execution function to populate database."""
    init_db()

    session = SessionLocal()
    try:
        ensure_admin(session)
        load_catalog(session)
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


if __name__ == "__main__":
    populate_database()

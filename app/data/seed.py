# app/data/seed.py
from app.data.database import SessionLocal
from app.data.models import MenuItemModel, TableModel, EventHallModel


def seed(db=None):
    own_session = db is None
    db = db or SessionLocal()
    try:
        # not forcing: only seed if empty
        if db.query(MenuItemModel).first():
            return False

        db.add_all([
            MenuItemModel(name="Paneer Tikka", category="Starters", price="₹220.00", stock=40),
            MenuItemModel(name="Butter Chicken", category="Main Course", price="350", stock=30),
            MenuItemModel(name="Gulab Jamun", category="Desserts", price="₹90", stock=60),
            TableModel(name="Window 2-seater", capacity=2, ac=True, price_per_hour=150, available=4),
            TableModel(name="Family 6-seater", capacity=6, ac=False, price_per_hour=300, available=2),
            EventHallModel(name="Banquet Hall", capacity=120, price_per_hour=5000, available=True),
        ])
        db.commit()
        return True
    finally:
        if own_session:
            db.close()

"""
Create tables and insert the initial programs (ISIS, IADM) when none exist.
Curricula and equivalences are loaded separately.
"""
from app.core.database import SessionLocal, engine
from app.models.base import Base
import app.models  # noqa: F401
from app.services.programs import seed_initial_data

Base.metadata.create_all(bind=engine)

db = SessionLocal()
try:
    created = seed_initial_data(db)
    if created:
        print(f"Seeded programs: {', '.join(p.code for p in created)}")
    else:
        print("Programs already present, nothing to do.")
finally:
    db.close()

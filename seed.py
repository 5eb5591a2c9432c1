"""
Create the schema, the initial staff admin and the starter service cards.

Safe to run repeatedly: existing rows are left untouched.

    ADMIN_EMAIL=... ADMIN_PASSWORD=... python seed.py
"""
import logging
import os

from config import Settings
from database import build_engine, build_session_factory, get_session_context, init_db
from models import Service, User, UserRole
from services.auth_service import hash_password

logger = logging.getLogger(__name__)

DEFAULT_ADMIN_EMAIL = "admin@example.com"
DEFAULT_ADMIN_PASSWORD = "admin123"

STARTER_SERVICES = [
    {
        "name": "Aménagement foncier",
        "slug": "amenagement-foncier",
        "description": "Lotissement, viabilisation, études topographiques et planification urbaine",
    },
    {
        "name": "Vente de terrains",
        "slug": "vente-terrains",
        "description": "Titres sécurisés, zones stratégiques en Côte d'Ivoire",
    },
    {
        "name": "Construction clé en main",
        "slug": "construction-cle-en-main",
        "description": "Maisons, villas, immeubles, de la conception à la livraison",
    },
    {
        "name": "Gestion immobilière",
        "slug": "gestion-immobiliere",
        "description": "Administration de biens, location et gestion locative",
    },
    {
        "name": "Transaction immobilière",
        "slug": "transaction-immobiliere",
        "description": "Achat, vente et location de propriétés",
    },
]


def seed_admin(db, email: str, password: str) -> bool:
    if db.query(User.id).filter(User.email == email).first():
        logger.info("Admin %s already exists", email)
        return False
    db.add(User(
        email=email,
        password=hash_password(password),
        name="Admin",
        role=UserRole.ADMIN.value,
        is_staff=True,
    ))
    logger.info("Created admin %s", email)
    return True


def seed_services(db) -> int:
    created = 0
    for card in STARTER_SERVICES:
        if db.query(Service.id).filter(Service.slug == card["slug"]).first():
            continue
        db.add(Service(title=card["name"], **card))
        created += 1
    logger.info("Created %s service cards", created)
    return created


def run(settings: Settings = None) -> None:
    settings = settings or Settings.from_env()
    engine = build_engine(settings.database_url, echo=settings.sql_echo)
    init_db(engine)

    email = os.getenv("ADMIN_EMAIL") or DEFAULT_ADMIN_EMAIL
    password = os.getenv("ADMIN_PASSWORD") or DEFAULT_ADMIN_PASSWORD
    with get_session_context(build_session_factory(engine)) as db:
        seed_admin(db, email, password)
        seed_services(db)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    run()

"""Seed the default course catalog and badge set into the database."""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parent.parent))

from sqlalchemy import select

from academy.core.security import get_password_hash
from academy.db.models.content import Module, Quiz
from academy.db.models.user import User
from academy.db.session import SessionLocal
from academy.services.gamification import DEFAULT_BADGES, GamificationService


def get_default_modules() -> list[dict]:
    """Return the starter modules, each with its optional quiz."""

    return [
        {
            "title": "Introduction au Streaming sur Twitch",
            "description": "Apprenez les bases pour commencer votre aventure de streamer sur Twitch",
            "content": "Configurer votre chaîne, choisir votre équipement et attirer vos premiers viewers.",
            "order": 1,
            "xp_reward": 150,
            "platform": "twitch",
            "is_published": True,
            "quiz": {
                "title": "Quiz : Bases de Twitch",
                "questions": [
                    {
                        "id": 1,
                        "question": "Quelle est la résolution recommandée pour le streaming sur Twitch ?",
                        "options": ["720p 30fps", "1080p 60fps", "1440p 30fps", "4K 30fps"],
                        "correct": 1,
                    },
                    {
                        "id": 2,
                        "question": "Quel est le débit minimum recommandé pour un stream de qualité ?",
                        "options": ["1 Mbps", "3 Mbps", "5 Mbps", "10 Mbps"],
                        "correct": 2,
                    },
                ],
            },
        },
        {
            "title": "Créer du Contenu Viral sur TikTok",
            "description": "Maîtrisez l'art de créer des vidéos TikTok qui captivent et engagent",
            "content": "Tendances, techniques de montage et stratégies pour faire exploser vos vues.",
            "order": 2,
            "xp_reward": 120,
            "platform": "tiktok",
            "is_published": True,
            "quiz": {
                "title": "Quiz : TikTok Viral",
                "questions": [
                    {
                        "id": 1,
                        "question": "Quelle est la durée idéale d'une vidéo TikTok pour maximiser l'engagement ?",
                        "options": ["15-30 secondes", "30-60 secondes", "1-2 minutes", "2-3 minutes"],
                        "correct": 1,
                    },
                ],
            },
        },
        {
            "title": "Monétiser votre Chaîne YouTube",
            "description": "Transformez votre passion en revenus avec les stratégies de monétisation YouTube",
            "content": "Méthodes de monétisation, optimisation SEO et création de contenu rentable.",
            "order": 3,
            "xp_reward": 200,
            "platform": "youtube",
            "is_published": True,
            "quiz": {
                "title": "Quiz : Monétisation YouTube",
                "questions": [
                    {
                        "id": 1,
                        "question": "Combien d'abonnés faut-il pour activer la monétisation YouTube ?",
                        "options": ["100", "500", "1000", "5000"],
                        "correct": 2,
                    },
                ],
            },
        },
        {
            "title": "Branding Personnel Multi-Plateformes",
            "description": "Construisez une marque personnelle cohérente sur toutes les plateformes",
            "content": "Identité visuelle, ton éditorial et stratégie cross-platform.",
            "order": 4,
            "xp_reward": 250,
            "platform": None,
            "is_published": False,
        },
    ]


def seed_modules(db) -> int:
    created = 0
    for definition in get_default_modules():
        definition = dict(definition)
        quiz = definition.pop("quiz", None)
        if db.scalar(select(Module).where(Module.title == definition["title"])):
            continue
        module = Module(**definition)
        db.add(module)
        db.flush()
        if quiz:
            db.add(Quiz(module_id=module.id, **quiz))
        created += 1
    db.commit()
    return created


def seed_admin(db, email: str, password: str) -> bool:
    if db.scalar(select(User).where(User.email == email)):
        return False
    db.add(
        User(
            email=email,
            hashed_password=get_password_hash(password),
            first_name="Admin",
            role="admin",
        )
    )
    db.commit()
    return True


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed modules, quizzes and badges")
    parser.add_argument("--admin-email", help="Also create an admin account with this email")
    parser.add_argument("--admin-password", help="Password for the admin account")
    args = parser.parse_args()
    if args.admin_email and not args.admin_password:
        parser.error("--admin-password is required with --admin-email")

    db = SessionLocal()
    try:
        print(f"Seeding {len(DEFAULT_BADGES)} badge definitions...")
        GamificationService(db).seed_badges(DEFAULT_BADGES)

        created = seed_modules(db)
        print(f"✓ {created} new modules created")

        if args.admin_email:
            if seed_admin(db, args.admin_email, args.admin_password):
                print(f"✓ Admin account created: {args.admin_email}")
            else:
                print(f"  Admin account already exists: {args.admin_email}")

        print("✓ Catalog seeding complete!")
    except Exception as exc:  # pragma: no cover - CLI feedback
        print(f"✗ Error seeding catalog: {exc}")
        raise
    finally:
        db.close()


if __name__ == "__main__":
    main()

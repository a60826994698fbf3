#!/usr/bin/env python3
"""
Insère le catalogue des templates email par défaut (13 templates globaux, inactifs).
Idempotent : les anciens templates par défaut sont supprimés avant insertion.
À exécuter depuis la racine du projet : `python3 scripts/seed_email_templates.py`.
"""
from pathlib import Path
import sys

# Ajouter la racine du projet au PYTHONPATH si besoin
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from inevent.database import SessionLocal, init_db
from inevent.services.default_templates import DEFAULT_TEMPLATES
from inevent.services.templates import seed_default_templates


def run():
    init_db()
    db = SessionLocal()
    try:
        count = seed_default_templates(db, DEFAULT_TEMPLATES)
        print(f"{count} templates email insérés avec succès.")
        print("Répartition : 1 inscription, 4 participants, 4 exposants, 4 speakers.")
        print("Tous les templates sont désactivés par défaut ; les organisateurs les activent depuis le tableau de bord.")
    except Exception as exc:
        print(f"Seed failed: {exc}")
        raise
    finally:
        db.close()


if __name__ == "__main__":
    run()

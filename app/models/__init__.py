"""
Models module - one repository module per entity.

Each module is a namespace of free functions (create, find_all, get, update,
remove) taking the SQLAlchemy session as their first argument:

    from app.models import company
    company.get(db, "c1")
"""

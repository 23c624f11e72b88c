from app.db.entities.object_entity import ObjectEntity
from app.db.entities.synchronization import Synchronization

__all__ = ["ObjectEntity", "Synchronization"]

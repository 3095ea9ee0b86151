from sqlalchemy.orm import Session
from typing import List, Optional

from training_engine.crud.base import CRUDBase
from training_engine.models.progress import TrainingProgress
from training_engine.schemas.progress import ProgressUpdate

class CRUDProgress(CRUDBase[TrainingProgress, ProgressUpdate, ProgressUpdate]):

    def get_by_assignment_and_material(self, db: Session, *, assignment_id: str, material_id: str) -> Optional[TrainingProgress]:
        return (
            db.query(TrainingProgress)
            .filter(TrainingProgress.assignment_id == assignment_id)
            .filter(TrainingProgress.material_id == material_id)
            .first()
        )

    def get_all_by_assignment(self, db: Session, *, assignment_id: str) -> List[TrainingProgress]:
        return (
            db.query(TrainingProgress)
            .filter(TrainingProgress.assignment_id == assignment_id)
            .order_by(TrainingProgress.created_at)
            .all()
        )


progress = CRUDProgress(TrainingProgress)

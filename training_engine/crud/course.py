from sqlalchemy.orm import Session, selectinload
from typing import List, Optional

from training_engine.crud.base import CRUDBase
from training_engine.models.course import Course, CourseMaterial
from training_engine.schemas.course import CourseCreate, CourseUpdate

class CRUDCourse(CRUDBase[Course, CourseCreate, CourseUpdate]):

    def _query_with_relationships(self, db: Session):
        return db.query(Course).options(
            selectinload(Course.course_materials).selectinload(CourseMaterial.material)
        )

    def get(self, db: Session, id: str) -> Optional[Course]:
        return self._query_with_relationships(db).filter(Course.id == id).first()

    def get_multi_by_tenant(
        self, db: Session, *, tenant_id: str, is_active: Optional[bool] = None, skip: int = 0, limit: int = 100
    ) -> List[Course]:
        query = db.query(Course).filter(Course.tenant_id == tenant_id)
        if is_active is not None:
            query = query.filter(Course.is_active == is_active)
        return query.order_by(Course.created_at.desc()).offset(skip).limit(limit).all()

    def get_course_material(self, db: Session, *, course_id: str, material_id: str) -> Optional[CourseMaterial]:
        return (
            db.query(CourseMaterial)
            .filter(CourseMaterial.course_id == course_id)
            .filter(CourseMaterial.material_id == material_id)
            .first()
        )

    def add_material(
        self, db: Session, *, course_id: str, material_id: str, order_index: int, is_required: bool
    ) -> CourseMaterial:
        course_material = CourseMaterial(
            course_id=course_id,
            material_id=material_id,
            order_index=order_index,
            is_required=is_required
        )
        db.add(course_material)
        db.commit()
        db.refresh(course_material)
        return course_material

    def remove_material(self, db: Session, *, course_id: str, material_id: str) -> Optional[CourseMaterial]:
        course_material = self.get_course_material(db, course_id=course_id, material_id=material_id)
        if course_material:
            db.delete(course_material)
            db.commit()
        return course_material

    def get_materials(self, db: Session, *, course_id: str) -> List[CourseMaterial]:
        return (
            db.query(CourseMaterial)
            .options(selectinload(CourseMaterial.material))
            .filter(CourseMaterial.course_id == course_id)
            .order_by(CourseMaterial.order_index)
            .all()
        )


course = CRUDCourse(Course)

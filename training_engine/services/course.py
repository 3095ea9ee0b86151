import logging
from typing import List, Optional
from sqlalchemy.orm import Session

from fastapi import HTTPException, status

from training_engine.core.exceptions import NotFoundError, persistence_guard
from training_engine.crud.course import course as crud_course
from training_engine.models.course import Course, CourseMaterial
from training_engine.schemas.course import CourseCreate, CourseMaterialCreate, CourseUpdate
from training_engine.services.material import material_service

logger = logging.getLogger(__name__)


class CourseService:

    def create_course(self, db: Session, tenant_id: str, course_in: CourseCreate, created_by: Optional[str] = None) -> Course:
        course_data = course_in.model_dump()
        course_data.update({"tenant_id": tenant_id, "created_by": created_by})
        with persistence_guard("Failed to create course", db):
            course = crud_course.create(db, obj_in=course_data)
        logger.info(f"Course {course.id} created in tenant {tenant_id}")
        return course

    def get_course(self, db: Session, course_id: str, tenant_id: Optional[str] = None) -> Course:
        course = crud_course.get(db, id=course_id)
        if not course or (tenant_id and course.tenant_id != tenant_id):
            raise NotFoundError(f"Course {course_id} not found.")
        return course

    def list_courses(
        self, db: Session, tenant_id: str, is_active: Optional[bool] = None, skip: int = 0, limit: int = 100
    ) -> List[Course]:
        return crud_course.get_multi_by_tenant(db, tenant_id=tenant_id, is_active=is_active, skip=skip, limit=limit)

    def update_course(self, db: Session, course_id: str, course_in: CourseUpdate, tenant_id: Optional[str] = None) -> Course:
        course = self.get_course(db, course_id, tenant_id)
        with persistence_guard("Failed to update course", db):
            return crud_course.update(db, db_obj=course, obj_in=course_in)

    def delete_course(self, db: Session, course_id: str, tenant_id: Optional[str] = None) -> None:
        course = self.get_course(db, course_id, tenant_id)
        with persistence_guard("Failed to delete course", db):
            crud_course.delete(db, id=course.id)
        logger.info(f"Course {course_id} deleted")

    def add_material(
        self, db: Session, course_id: str, material_id: str, link_in: CourseMaterialCreate, tenant_id: Optional[str] = None
    ) -> CourseMaterial:
        course = self.get_course(db, course_id, tenant_id)
        material = material_service.get_material(db, material_id, course.tenant_id)

        if crud_course.get_course_material(db, course_id=course.id, material_id=material.id):
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Material is already part of this course."
            )

        with persistence_guard("Failed to add material to course", db):
            return crud_course.add_material(
                db,
                course_id=course.id,
                material_id=material.id,
                order_index=link_in.order_index,
                is_required=link_in.is_required
            )

    def remove_material(self, db: Session, course_id: str, material_id: str, tenant_id: Optional[str] = None) -> None:
        course = self.get_course(db, course_id, tenant_id)
        with persistence_guard("Failed to remove material from course", db):
            removed = crud_course.remove_material(db, course_id=course.id, material_id=material_id)
        if not removed:
            raise NotFoundError(f"Material {material_id} is not part of course {course_id}.")

    def get_course_materials(self, db: Session, course_id: str, tenant_id: Optional[str] = None) -> List[CourseMaterial]:
        course = self.get_course(db, course_id, tenant_id)
        return crud_course.get_materials(db, course_id=course.id)


course_service = CourseService()

import logging
from typing import List, Optional
from sqlalchemy.orm import Session

from training_engine.core.exceptions import NotFoundError, persistence_guard
from training_engine.crud.material import material as crud_material
from training_engine.models.material import Material
from training_engine.schemas.material import MaterialCreate, MaterialUpdate

logger = logging.getLogger(__name__)


class MaterialService:

    def create_material(self, db: Session, tenant_id: str, material_in: MaterialCreate, created_by: Optional[str] = None) -> Material:
        material_data = material_in.model_dump(exclude={"metadata"})
        material_data.update({
            "tenant_id": tenant_id,
            "created_by": created_by,
            "metadata_": material_in.metadata,
        })
        with persistence_guard("Failed to create material", db):
            material = crud_material.create(db, obj_in=material_data)
        logger.info(f"Material {material.id} created in tenant {tenant_id}")
        return material

    def get_material(self, db: Session, material_id: str, tenant_id: Optional[str] = None) -> Material:
        material = crud_material.get(db, id=material_id)
        if not material or (tenant_id and material.tenant_id != tenant_id):
            raise NotFoundError(f"Material {material_id} not found.")
        return material

    def list_materials(
        self,
        db: Session,
        tenant_id: str,
        material_type: Optional[str] = None,
        is_required: Optional[bool] = None,
        search: Optional[str] = None,
        skip: int = 0,
        limit: int = 100
    ) -> List[Material]:
        return crud_material.get_multi_by_tenant(
            db,
            tenant_id=tenant_id,
            material_type=material_type,
            is_required=is_required,
            search=search,
            skip=skip,
            limit=limit
        )

    def update_material(self, db: Session, material_id: str, material_in: MaterialUpdate, tenant_id: Optional[str] = None) -> Material:
        material = self.get_material(db, material_id, tenant_id)
        update_data = material_in.model_dump(exclude_unset=True)
        if "metadata" in update_data:
            update_data["metadata_"] = update_data.pop("metadata")
        with persistence_guard("Failed to update material", db):
            return crud_material.update(db, db_obj=material, obj_in=update_data)

    def delete_material(self, db: Session, material_id: str, tenant_id: Optional[str] = None) -> None:
        material = self.get_material(db, material_id, tenant_id)
        with persistence_guard("Failed to delete material", db):
            crud_material.delete(db, id=material.id)
        logger.info(f"Material {material_id} deleted")


material_service = MaterialService()

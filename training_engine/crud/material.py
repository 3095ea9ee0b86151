from sqlalchemy.orm import Session
from typing import List, Optional

from training_engine.crud.base import CRUDBase
from training_engine.models.material import Material
from training_engine.schemas.material import MaterialCreate, MaterialUpdate

class CRUDMaterial(CRUDBase[Material, MaterialCreate, MaterialUpdate]):

    def get_multi_by_tenant(
        self,
        db: Session,
        *,
        tenant_id: str,
        material_type: Optional[str] = None,
        is_required: Optional[bool] = None,
        search: Optional[str] = None,
        skip: int = 0,
        limit: int = 100
    ) -> List[Material]:
        query = db.query(Material).filter(Material.tenant_id == tenant_id)
        if material_type:
            query = query.filter(Material.material_type == material_type)
        if is_required is not None:
            query = query.filter(Material.is_required == is_required)
        if search:
            query = query.filter(Material.title.ilike(f"%{search.lower()}%"))
        return query.order_by(Material.created_at.desc()).offset(skip).limit(limit).all()


material = CRUDMaterial(Material)

from datetime import datetime
from typing import Optional
from sqlalchemy.orm import Session

from training_engine.crud.analytics import analytics as crud_analytics
from training_engine.schemas.analytics import CourseAnalytics, OrganizationAnalytics, UserAnalytics
from training_engine.services.course import course_service
from training_engine.utils.timeutils import utcnow


class AnalyticsService:
    def get_user_analytics(self, db: Session, tenant_id: str, user_id: str, now: Optional[datetime] = None) -> UserAnalytics:
        return crud_analytics.get_user_analytics(db, tenant_id=tenant_id, user_id=user_id, now=now or utcnow())

    def get_course_analytics(self, db: Session, course_id: str, tenant_id: Optional[str] = None, now: Optional[datetime] = None) -> CourseAnalytics:
        course = course_service.get_course(db, course_id, tenant_id)
        return crud_analytics.get_course_analytics(db, course_id=course.id, now=now or utcnow())

    def get_organization_analytics(self, db: Session, tenant_id: str, now: Optional[datetime] = None) -> OrganizationAnalytics:
        return crud_analytics.get_organization_analytics(db, tenant_id=tenant_id, now=now or utcnow())


analytics_service = AnalyticsService()

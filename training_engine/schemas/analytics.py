from pydantic import BaseModel


class UserAnalytics(BaseModel):
    user_id: str
    total_assignments: int = 0
    completed_assignments: int = 0
    in_progress_assignments: int = 0
    overdue_assignments: int = 0
    completion_rate: float = 0.0
    average_time_spent: float = 0.0
    average_score: float = 0.0


class CourseAnalytics(BaseModel):
    course_id: str
    total_assignments: int = 0
    completed_assignments: int = 0
    completion_rate: float = 0.0
    average_time_spent: float = 0.0
    average_score: float = 0.0


class OrganizationAnalytics(BaseModel):
    tenant_id: str
    total_materials: int = 0
    total_courses: int = 0
    total_assignments: int = 0
    completed_assignments: int = 0
    overdue_assignments: int = 0
    completion_rate: float = 0.0
    average_time_spent: float = 0.0

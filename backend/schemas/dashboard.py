from backend.schemas.common import CamelModel


class DashboardStats(CamelModel):
    scheduled_sessions: int
    connected_mentors: int
    mentoring_hours: int
    average_rating: float

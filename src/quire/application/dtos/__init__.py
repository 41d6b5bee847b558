from quire.application.dtos.editorial_dto import DraftDashboard

__all__ = ["DraftDashboard"]

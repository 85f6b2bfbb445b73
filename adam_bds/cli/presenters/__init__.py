from .summary import SummaryPresenter

__all__ = ["SummaryPresenter"]

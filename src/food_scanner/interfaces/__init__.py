"""Abstract interfaces for the Discord Food Scanner."""

from .page import Affordances, Page, PageField, RenderedPage
from .message_transport import Attachment, IncomingMessage, MessageTransport, TransportError
from .food_analyzer import AnalysisError, FoodAnalyzer

__all__ = [
    "Affordances",
    "AnalysisError",
    "Attachment",
    "FoodAnalyzer",
    "IncomingMessage",
    "MessageTransport",
    "Page",
    "PageField",
    "RenderedPage",
    "TransportError",
]

from . import exceptions
from . import ladok_data_models as ldm
from .canvas_agent import CanvasAgent
from .sessions import CanvasSession, LadokSession
from .sync_schedule import SyncSchedule
from .synchronizer import GradeSynchronizer

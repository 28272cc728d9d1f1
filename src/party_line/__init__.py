"""Party Line - find partisan bills a legislator voted on and where they broke ranks."""

__version__ = "0.1.0"

from party_line.cache import LegislatorCache as LegislatorCache
from party_line.config import AnalysisConfig as AnalysisConfig
from party_line.loader import RecordLoader as RecordLoader
from party_line.models import Bill as Bill
from party_line.models import Legislator as Legislator
from party_line.pipeline import PartyLineAnalysis as PartyLineAnalysis

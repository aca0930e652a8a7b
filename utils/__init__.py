# DEPENDENCIES
from .text_processor import TextProcessor
from .logger import LeaseAnalyzerLogger
from .validators import LeaseTextValidator
from .document_reader import DocumentReader


__all__ = ['DocumentReader',
           'TextProcessor',
           'LeaseTextValidator',
           'LeaseAnalyzerLogger',
          ]

"""
assignments - filter, batch and number upcoming coursework, then open one
"""
from .pipeline import run_pipeline

__all__ = ['run_pipeline']

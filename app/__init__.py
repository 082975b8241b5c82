# -*- coding: utf-8 -*-
"""
EduCenter Application Core Module
"""

from .config import Config, Roles

__all__ = ["Config", "Roles"]

# -*- coding: utf-8 -*-
"""Cardiovascular health backend: lab results, symptoms, trends and triage."""

__version__ = "0.1.0"

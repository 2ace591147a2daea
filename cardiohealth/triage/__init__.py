# -*- coding: utf-8 -*-
"""Threshold-based safety alerts from the most recent readings."""

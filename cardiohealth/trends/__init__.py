# -*- coding: utf-8 -*-
"""Health trends: per-metric series, filtering and composite risk."""

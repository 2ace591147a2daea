# -*- coding: utf-8 -*-
"""Lab results domain (blood pressure, cholesterol panel, HbA1c)."""

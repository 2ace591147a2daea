# -*- coding: utf-8 -*-
"""Self-reported symptoms domain."""

# -*- coding: utf-8 -*-
"""CSV exports of a user's own lab results and symptoms."""

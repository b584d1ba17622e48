"""Timeouts for calls to the hosting platforms, in seconds."""

from __future__ import annotations

# Hosting API calls (service listing, deploy trigger, status)
API_TIMEOUT_SECONDS = 30.0

# Local vercel CLI calls (whoami, env rm/add)
VERCEL_TIMEOUT_SECONDS = 60.0

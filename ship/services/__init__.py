"""Application services: the release workflow and the request composer."""

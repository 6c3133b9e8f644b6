"""Application layer for SBO Core.

Ports, request models and the services that orchestrate the observation
workflow, the read path and the dashboard.
"""

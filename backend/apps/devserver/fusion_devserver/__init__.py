"""Development server proxying /api to the Fusion backend."""

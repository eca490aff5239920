"""
REST API layer: versioned routes, serializers and error envelope.
"""

"""
Replicate API resources and client.

This package contains:
- base: Prediction, ModelVersion and PredictionStatus
- errors: Exception hierarchy and the HTTP status classifier
- client: Client bound to one model version
"""

"""Services Layer: request orchestration and its two collaborators.

Invariants:
    - RequestHandler receives its collaborators through the constructor
    - Only ArtifactError escapes RequestHandler.handle
"""

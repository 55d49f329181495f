"""Core utilities and shared infrastructure.

- config: Configuration loading and validation
- constants: Collection names, document ids, sample defaults
- exceptions: Custom exception hierarchy
- clients: Firestore and Vision client construction
"""

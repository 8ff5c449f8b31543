# Dependency wiring for the API layer lives in dependency_injection.py

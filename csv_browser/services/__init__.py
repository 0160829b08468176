"""
Collaborators around the core: preference persistence and input loading.
"""

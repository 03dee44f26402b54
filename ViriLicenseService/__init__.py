"""
Viri License Service Django project.
"""

"""
Evaluation Celery tasks.
"""

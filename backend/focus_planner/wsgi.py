"""
WSGI config for focus_planner project.
"""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'focus_planner.settings')

application = get_wsgi_application()

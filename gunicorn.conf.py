"""Gunicorn configuration for production."""

# Application
wsgi_app = 'zakat:create_app()'

# Server socket
bind = '0.0.0.0:8080'

# Workers share nothing: each holds its own rate table and refresh thread
workers = 1
threads = 4
worker_class = 'gthread'
timeout = 30
keepalive = 2

# Logging
accesslog = '-'
errorlog = '-'
loglevel = 'info'

# Process naming
proc_name = 'zakat-calculator'

# Server mechanics
daemon = False
pidfile = None
umask = 0
user = None
group = None
tmp_upload_dir = None

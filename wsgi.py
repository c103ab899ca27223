"""
Gunicorn entry point (Procfile: web: gunicorn wsgi:app).

Run directly for the Flask dev server on $PORT.
"""
import os

from revenuela import create_app

app = create_app()

if __name__ == '__main__':
    app.run(host='0.0.0.0', port=int(os.getenv('PORT', 8080)))

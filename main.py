"""Paint mixer web app (Flask), development runner.

Usage
-----
$ pip install -e .
$ python main.py                       # starts on http://127.0.0.1:5000
$ PAINT_MIXER_DARK_MODE=true python main.py

All colour maths lives in ``paint_mixer``; this file only starts the server.
"""

from paint_mixer.app import create_app

app = create_app()

if __name__ == "__main__":
    app.run(debug=True, threaded=True)

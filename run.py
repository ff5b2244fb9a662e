from kamus.app import create_app

app = create_app()

if __name__ == "__main__":
    # Development server; use kamus/run.py for the eventlet server
    app.run(host="127.0.0.1", port=8080, debug=True, use_reloader=False)

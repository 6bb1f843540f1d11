"""Serve the supervision API with uvicorn and open the interactive docs."""
import argparse
import threading
import time
import webbrowser

import uvicorn


def open_docs(url: str, delay: float = 2.0):
    time.sleep(delay)  # server startup
    webbrowser.open(url)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Room supervision scheduler API")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8000)
    parser.add_argument("--no-browser", action="store_true", help="Do not open /docs on start")
    args = parser.parse_args(argv)

    if not args.no_browser:
        url = f"http://localhost:{args.port}/docs"
        threading.Thread(target=open_docs, args=(url,), daemon=True).start()

    from main import app
    uvicorn.run(app, host=args.host, port=args.port, workers=1)


if __name__ == "__main__":
    main()

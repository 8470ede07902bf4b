import argparse
import os

import uvicorn

BACKEND_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "backend")
APP_PATH = "app:app"


def main():
    parser = argparse.ArgumentParser(description="Bootloader for the pitch deck FastAPI backend.")
    parser.add_argument("--host", default=os.getenv("HOST", "0.0.0.0"), help="Host to bind")
    parser.add_argument("--port", type=int, default=int(os.getenv("PORT", "3001")), help="Port to bind")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload (dev mode)")
    args = parser.parse_args()

    print(f"[BOOTLOADER] Starting pitch deck backend on {args.host}:{args.port} ...")
    uvicorn.run(APP_PATH, host=args.host, port=args.port, reload=args.reload, app_dir=BACKEND_DIR)


if __name__ == "__main__":
    main()

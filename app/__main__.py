import argparse


def main():
    import uvicorn

    parser = argparse.ArgumentParser(description="Gala ticket service")
    parser.add_argument("--host", default="0.0.0.0", help="Host to bind to")
    parser.add_argument("--port", type=int, default=3000, help="Port to bind to")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload")

    args = parser.parse_args()

    print(f"""
  Gala ticket service
    POST /generate-tickets   - Issue n tickets (body: {{"n": 5}})
    GET  /generate-ticket    - Issue a single ticket
    GET  /                   - Web interface
  Docs: http://{args.host}:{args.port}/docs
""")

    uvicorn.run(
        "app.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
    )


if __name__ == "__main__":
    main()

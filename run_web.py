"""Run the character guesser web server."""

import uvicorn

from guesser.config import get_config

if __name__ == "__main__":
    config = get_config()

    print("=" * 50)
    print("  Character Guesser - Web Server")
    print(f"  Reasoning service: {config.llm.provider} / {config.llm.model or 'default model'}")
    print("=" * 50)
    print()
    print(f"Starting server at http://localhost:{config.server.port}")
    print("Press Ctrl+C to stop")
    print()

    uvicorn.run(
        "guesser.web.server:app",
        host=config.server.host,
        port=config.server.port,
        reload=True,
    )

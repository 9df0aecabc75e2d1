from dotenv import load_dotenv

# Load environment variables from .env before settings are read
load_dotenv()

import uvicorn  # noqa: E402

from api.main import app  # noqa: E402,F401


if __name__ == "__main__":
    uvicorn.run("api.main:app", host="0.0.0.0", port=8000)

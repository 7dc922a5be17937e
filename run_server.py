"""
Run the CoinDash backend server.
"""
import os

# Load environment
from dotenv import load_dotenv
load_dotenv(os.path.join(os.path.dirname(os.path.abspath(__file__)), ".env"))

# Run uvicorn
import uvicorn

if __name__ == "__main__":
    print("Starting CoinDash Backend Server...")
    print("API Docs: http://localhost:8000/docs")
    print("-" * 50)

    uvicorn.run(
        "coindash.main:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000")),
        reload=True,
        log_level="info",
    )

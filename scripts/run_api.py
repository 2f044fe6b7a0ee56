import uvicorn

from api.config import API_HOST, API_PORT


def run() -> None:
    uvicorn.run("api.main:app", host=API_HOST, port=API_PORT)


if __name__ == "__main__":
    run()

import uvicorn

from quotes_api.core.app_factory import create_app

app = create_app()


if __name__ == "__main__":
    uvicorn.run("quotes_api.main:app", host="127.0.0.1", port=3000)

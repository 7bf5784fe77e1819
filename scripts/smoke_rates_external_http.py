import json
import os
import sys

from fastapi.testclient import TestClient

"""Smoke script against the live rate provider.

Loads the converter page for a fresh session, converts 100 USD to EUR, swaps,
then asks the JSON API for the same pair so the two can be compared by eye.
Needs network access; failures show up as the error toast / a 502.
"""


def run():
    from currency_converter.core.config import Settings
    from currency_converter.main import create_app

    settings = Settings()
    settings.init_post_load()
    client = TestClient(create_app(settings_override=settings))

    client.get("/ui")
    page = client.post("/ui", data={"amount": "100", "source": "USD", "destination": "EUR"})
    swapped = client.post(
        "/ui",
        data={"amount": "100", "source": "USD", "destination": "EUR", "action": "swap"},
    )
    api = client.get("/api/convert", params={"amount": 100, "source": "USD", "destination": "EUR"})

    print(
        json.dumps(
            {
                "page_status": page.status_code,
                "page_has_error": "Failed to fetch exchange rates" in page.text,
                "swap_status": swapped.status_code,
                "api": {"status": api.status_code, "body": api.json()},
            },
            indent=2,
        )
    )


if __name__ == "__main__":
    sys.path.append(os.getcwd())
    run()

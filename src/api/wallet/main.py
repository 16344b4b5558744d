"""Wallet service entry point: CREDIT/DEBIT transactions and balances."""

import os
from dotenv import load_dotenv

# Must run before importing modules that read env vars (api.security)
load_dotenv()

from api.application import create_app
from api.routes import transactions
from utils.logging import setup_structured_logging

SERVICE_NAME = "wallet-service"

setup_structured_logging(SERVICE_NAME)

app = create_app(
    SERVICE_NAME,
    "Wallet ledger: transactions and balances",
    [transactions.router],
)


if __name__ == "__main__":
    import uvicorn
    port = int(os.getenv("PORT", 8001))
    uvicorn.run(app, host="0.0.0.0", port=port, access_log=False)

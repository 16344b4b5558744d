USERS_COLLECTION_NAME = 'users'
TRANSACTIONS_COLLECTION_NAME = 'transactions'

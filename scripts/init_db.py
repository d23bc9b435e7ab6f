from family_portal.core.config import settings
from family_portal.db.store import Store
def init():
    store = Store(settings.DATABASE_URL).open()
    store.close()
if __name__ == "__main__":
    init()
    print("Database schema created.")

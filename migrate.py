from devconnector.db.session import engine, Base
import devconnector.models  # registers User, Profile, Education, Post, Like, Comment


def run_migrations():
    print("Running database migrations...")
    Base.metadata.create_all(bind=engine)
    print("Migrations completed successfully.")


if __name__ == "__main__":
    run_migrations()

from sqlalchemy.orm import declarative_base

Base = declarative_base()

# Models register themselves by importing Base from this module;
# covercraft.db.models imports all of them.

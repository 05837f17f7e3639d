from sqlalchemy import MetaData

# Shared by every table so a single create_all builds the whole schema
metadata = MetaData()

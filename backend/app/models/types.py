from sqlalchemy import BigInteger, Integer

# SQLite only autoincrements INTEGER primary keys
BigIntPk = BigInteger().with_variant(Integer, "sqlite")

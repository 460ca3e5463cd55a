from peewee import (
    DatabaseProxy,
    Model,
    CharField,
    )

db_proxy = DatabaseProxy()

class User(Model):
    """アカウントテーブル。パスワードは平文で保持する"""
    user_id = CharField(primary_key=True, max_length=20)
    password = CharField(max_length=20)
    nickname = CharField(max_length=30)
    comment = CharField(max_length=100, default="")

    class Meta:
        database = db_proxy
        table_name = 'users'

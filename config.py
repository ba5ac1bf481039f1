import os
import mysql.connector
from mysql.connector import pooling
from dotenv import load_dotenv

from repository import MySQLTransactionRepository, MySQLUserRepository

load_dotenv()

class Config:
    SECRET_KEY = os.getenv('SECRET_KEY')
    MYSQL_HOST = os.getenv('MYSQL_HOST')
    MYSQL_USER = os.getenv('MYSQL_USER')
    MYSQL_PASSWORD = os.getenv('MYSQL_PASSWORD')
    MYSQL_DATABASE = os.getenv('MYSQL_DATABASE', 'chalet_db')
    MYSQL_POOL_SIZE = int(os.getenv('MYSQL_POOL_SIZE', '5'))

    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
    RECENT_TRANSACTIONS_LIMIT = 10
    SAMPLE_BATCH_SIZE = 5

    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'

    @staticmethod
    def init_repositories(app):
        pool = mysql.connector.pooling.MySQLConnectionPool(
            pool_name="chalet_pool",
            pool_size=app.config['MYSQL_POOL_SIZE'],
            host=app.config['MYSQL_HOST'],
            user=app.config['MYSQL_USER'],
            password=app.config['MYSQL_PASSWORD'],
            database=app.config['MYSQL_DATABASE']
        )
        app.transactions = MySQLTransactionRepository(pool)
        app.users = MySQLUserRepository(pool)

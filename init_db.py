import os
import mysql.connector
from config import Config

SCHEMA_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'schema.sql')

def init_db(schema_path=SCHEMA_PATH):
    conn = mysql.connector.connect(
        host=Config.MYSQL_HOST,
        user=Config.MYSQL_USER,
        password=Config.MYSQL_PASSWORD,
        database=Config.MYSQL_DATABASE
    )
    try:
        with conn.cursor() as cur:
            with open(schema_path, 'r') as f:
                # schema.sql holds several CREATE TABLE statements; apply them one at a time
                for statement in f.read().split(';'):
                    if statement.strip():
                        cur.execute(statement)
            conn.commit()
    finally:
        conn.close()

if __name__ == "__main__":
    init_db()

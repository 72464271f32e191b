"""
Preference Store for TapCalc
Keeps user settings (currently the light/dark theme) in SQLite
"""
import sqlite3
from datetime import datetime
import config


class PreferenceStore:
    def __init__(self, db_path=config.DB_PATH):
        self.db_path = str(db_path)
        self.init_database()

    def get_connection(self):
        """Create and return a database connection"""
        return sqlite3.connect(self.db_path)

    def init_database(self):
        """Initialize preference table"""
        conn = self.get_connection()
        cursor = conn.cursor()

        cursor.execute('''
            CREATE TABLE IF NOT EXISTS preferences (
                key TEXT PRIMARY KEY,
                value TEXT NOT NULL,
                updated_at TEXT NOT NULL
            )
        ''')

        conn.commit()
        conn.close()

    def get(self, key, default=None):
        """Get a stored value, or default when the key is missing"""
        conn = self.get_connection()
        cursor = conn.cursor()
        cursor.execute('SELECT value FROM preferences WHERE key = ?', (key,))
        row = cursor.fetchone()
        conn.close()
        return row[0] if row else default

    def set(self, key, value):
        """Insert or replace a value"""
        updated_at = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        conn = self.get_connection()
        cursor = conn.cursor()
        cursor.execute('''
            INSERT INTO preferences (key, value, updated_at) VALUES (?, ?, ?)
            ON CONFLICT(key) DO UPDATE SET value = excluded.value, updated_at = excluded.updated_at
        ''', (key, str(value), updated_at))
        conn.commit()
        conn.close()

    def delete(self, key):
        """Remove a key; returns True if something was deleted"""
        conn = self.get_connection()
        cursor = conn.cursor()
        cursor.execute('DELETE FROM preferences WHERE key = ?', (key,))
        deleted = cursor.rowcount > 0
        conn.commit()
        conn.close()
        return deleted

    def all(self):
        """All preferences as a dict"""
        conn = self.get_connection()
        cursor = conn.cursor()
        cursor.execute('SELECT key, value FROM preferences ORDER BY key')
        rows = cursor.fetchall()
        conn.close()
        return dict(rows)

    def get_bool(self, key, default=False):
        value = self.get(key)
        if value is None:
            return default
        return value == "1"

    def set_bool(self, key, value):
        self.set(key, "1" if value else "0")

    def is_dark_mode(self):
        """Theme flag, light when never set"""
        return self.get_bool(config.DARK_MODE_KEY, False)

    def set_dark_mode(self, value):
        self.set_bool(config.DARK_MODE_KEY, bool(value))

DDL = """
CREATE TABLE IF NOT EXISTS kv (
  key        TEXT PRIMARY KEY,                       -- clé logique (ex: "math_adventure_users")
  value      TEXT NOT NULL,                          -- document JSON complet de la table
  updated_ts INTEGER NOT NULL DEFAULT (strftime('%s','now'))
);
"""
def apply(con): con.executescript(DDL)

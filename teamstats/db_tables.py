# db_tables.py: table and view names used by the services
MATCHES            = "matches"            # default schema: public
PLAYER_STATS       = "player_stats"
PLAYER_TOTAL_STATS = "player_total_stats"  # view aggregating player_stats per player

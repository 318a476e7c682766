# =============================================================================
# PIATTAFORMA B2B - NOTIFICHE REPOSITORY
# =============================================================================

from typing import Optional, List, Dict, Any

from .base import BaseRepository


class NotificheRepository(BaseRepository[Dict[str, Any]]):
    """Repository per notifiche in-app."""

    table_name = 'notifications'

    def insert(
        self,
        user_id: int,
        tipo: str,
        icon: str,
        color: str,
        message: str,
        brand_id: str = None,
        brand_name: str = None
    ) -> Dict[str, Any]:
        """Inserisce una notifica non letta."""
        return self._execute_one("""
            INSERT INTO notifications
                (user_id, type, icon, color, brand_id, brand_name, message, read)
            VALUES (%s, %s, %s, %s, %s, %s, %s, FALSE)
            RETURNING *
        """, (user_id, tipo, icon, color, brand_id, brand_name, message))

    def list_by_user(self, user_id: int, limit: int = 20, offset: int = 0) -> List[Dict[str, Any]]:
        """Notifiche utente, più recenti prima, con nome e logo brand."""
        return self._execute_query("""
            SELECT
                n.id,
                n.user_id,
                n.type,
                n.icon,
                n.color,
                n.brand_id,
                COALESCE(n.brand_name, b.name) AS brand_name,
                b.logo AS brand_logo,
                n.message,
                n.read,
                n.read_at,
                n.created_at
            FROM notifications n
            LEFT JOIN brands b ON n.brand_id = b.id
            WHERE n.user_id = %s
            ORDER BY n.created_at DESC, n.id DESC
            LIMIT %s OFFSET %s
        """, (user_id, limit, offset))

    def count_by_user(self, user_id: int) -> int:
        return self.count("user_id = %s", (user_id,))

    def count_unread(self, user_id: int) -> int:
        return self.count("user_id = %s AND read = FALSE", (user_id,))

    def mark_read(self, notifica_id: int, user_id: int) -> Optional[Dict[str, Any]]:
        """
        Segna come letta. read_at resta quello della prima lettura.

        Returns:
            Riga aggiornata, None se non esiste o appartiene ad altro utente
        """
        return self._execute_one("""
            UPDATE notifications
            SET read = TRUE,
                read_at = COALESCE(read_at, CURRENT_TIMESTAMP)
            WHERE id = %s AND user_id = %s
            RETURNING *
        """, (notifica_id, user_id))

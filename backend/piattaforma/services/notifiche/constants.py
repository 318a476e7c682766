"""
Costanti notifiche in-app - tipi, icone, colori.
"""


class TipoNotifica:
    """Tipi notifica (colonna notifications.type)"""
    BRAND_ACTIVATION = 'BRAND_ACTIVATION'
    CATALOG_ADDED = 'CATALOG_ADDED'
    BRAND_EXPIRED = 'BRAND_EXPIRED'
    ORDER_STATUS = 'ORDER_STATUS'
    SYSTEM = 'SYSTEM'

    ALL = [BRAND_ACTIVATION, CATALOG_ADDED, BRAND_EXPIRED, ORDER_STATUS, SYSTEM]

    # Icone (nomi lucide-react usati dal frontend)
    ICONS = {
        BRAND_ACTIVATION: 'BadgeCheck',
        CATALOG_ADDED: 'BookOpenCheck',
        BRAND_EXPIRED: 'CalendarX',
        ORDER_STATUS: 'Package',
        SYSTEM: 'Info',
    }

    # Colori per UI (Tailwind)
    COLORS = {
        BRAND_ACTIVATION: 'green',
        CATALOG_ADDED: 'blue',
        BRAND_EXPIRED: 'red',
        ORDER_STATUS: 'yellow',
        SYSTEM: 'gray',
    }


class CanaleNotifica:
    """Side effect del fan-out per destinatario"""
    NOTIFICA = 'notifica'
    EMAIL = 'email'


# Paginazione inbox
INBOX_PAGE_SIZE = 20

"""Servizi applicativi: cataloghi, notifiche, email."""

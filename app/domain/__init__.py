"""Domain packages: chat, appointments, finance"""

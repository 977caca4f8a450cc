"""
cycleguard core - the Guard, its forwarding dispatcher, config and errors.
"""

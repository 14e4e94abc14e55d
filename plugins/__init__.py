"""
Bot plugins. Each subdirectory with a plugin.py is loaded by core.PluginLoader.
"""

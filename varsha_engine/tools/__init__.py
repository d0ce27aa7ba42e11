# Varsha Engine - API tools

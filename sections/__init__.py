# sections/__init__.py

"""Run the order bridge: ``python -m shopify_woo_bridge``."""

from shopify_woo_bridge.api.server import main

if __name__ == "__main__":
    main()

class CacheTTL:
    """
    TTL values (in seconds) for different cache types.
    """

    # Insights only depend on the request fingerprint
    INSIGHT = 60 * 60 * 24           # 24 hours

    # Chat answers may change
    CHAT = 60 * 10                   # 10 minutes

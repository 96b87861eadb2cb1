"""
Recommendation engine: turns an inventory snapshot into ranked dashboard
cards, order requests and stock alerts.

Modules
-------
rules         : RecommendationContext + RecommendationRule descriptors and
                the ordered RULES tuple. Pure predicates and card builders.
ranker        : generate_recommendations(): evaluate, sort, cap.
order_request : OrderLine + build_order_request(): what to reorder and how much.
alerts        : StockAlert + derive_stock_alerts(): per-item attention notices.
"""

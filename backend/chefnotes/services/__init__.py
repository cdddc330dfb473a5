# Services package init
"""
ChefNotes Backend — Services Layer
====================================

What:  Business logic layer sitting between routes (HTTP) and the entity store.

Service Inventory:
    - LLMService (abstract): Interface for the generative text provider
    - GeminiService: Concrete implementation using Google Gemini
    - ContentAggregator: Ordered note text for one recipe
    - RecipeSynthesizer: Prompt building and the generation call
    - RecipeService: CRUD plus aggregate → synthesize → persist workflow
"""

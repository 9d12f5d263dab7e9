"""
Cosine similarity scoring.

Scores are dot(a, b) / (|a| * |b|), defined as 0.0 when either vector has
zero magnitude.
"""

import numpy as np
from sklearn.metrics.pairwise import cosine_similarity as _sk_cosine_similarity

from synapse.utils.exceptions import ValidationError


def cosine_similarity(embedding1: list[float], embedding2: list[float]) -> float:
    """
    Compute cosine similarity between two embeddings.

    Args:
        embedding1: First embedding vector
        embedding2: Second embedding vector

    Returns:
        Similarity score in [-1, 1]

    Raises:
        ValidationError: If the vectors differ in length
    """
    if len(embedding1) != len(embedding2):
        raise ValidationError(
            "Embedding dimensions differ",
            context={"left": len(embedding1), "right": len(embedding2)},
        )
    if not embedding1:
        return 0.0

    vec1 = np.asarray(embedding1, dtype=float).reshape(1, -1)
    vec2 = np.asarray(embedding2, dtype=float).reshape(1, -1)

    # sklearn normalizes zero vectors to zero, so their score is 0.0
    return float(_sk_cosine_similarity(vec1, vec2)[0][0])


def batch_cosine_similarity(
    query_embedding: list[float], embeddings: list[list[float]]
) -> list[float]:
    """
    Compute cosine similarity between a query and multiple embeddings.

    Args:
        query_embedding: Query embedding vector
        embeddings: Embedding vectors to compare against, all of the query's length

    Returns:
        Similarity scores, in the same order as embeddings
    """
    if not embeddings:
        return []

    query_vec = np.asarray(query_embedding, dtype=float).reshape(1, -1)
    embedding_matrix = np.asarray(embeddings, dtype=float)
    if embedding_matrix.ndim != 2 or embedding_matrix.shape[1] != query_vec.shape[1]:
        raise ValidationError(
            "Embedding dimensions differ",
            context={"query": query_vec.shape[1], "corpus": embedding_matrix.shape},
        )

    similarities = _sk_cosine_similarity(query_vec, embedding_matrix)[0]
    return [float(score) for score in similarities]

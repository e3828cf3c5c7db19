class ConsulURIs:
    V1 = "/v1"
    KV = V1 + "/kv"
